from quizgen.app import main

main()
