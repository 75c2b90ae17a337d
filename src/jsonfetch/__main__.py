from jsonfetch.app import main

main()
