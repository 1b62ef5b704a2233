from mcl.cli.app import main

main()
