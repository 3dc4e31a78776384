from dotforge.cli import main

main()
