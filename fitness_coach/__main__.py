from fitness_coach.cli import main

main()
