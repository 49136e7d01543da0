from hearthdecks.cli import main

main()
