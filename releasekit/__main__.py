from releasekit.cli.app import main

main()
