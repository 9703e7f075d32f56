from dockhand.cli.app import main

main()
