from resistor_search.cli.main import main

main()
