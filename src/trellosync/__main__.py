from trellosync.cli import main

main()
