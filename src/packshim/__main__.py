from packshim.cli import main

main()
