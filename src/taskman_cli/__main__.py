from taskman_cli.main import main

main()
