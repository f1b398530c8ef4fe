from cursor2obs.cli import main

main()
