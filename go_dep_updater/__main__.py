from go_dep_updater.cli import main

main()
