from ili.cli import main

main()
