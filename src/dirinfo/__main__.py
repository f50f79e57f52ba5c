from dirinfo.cli import main

main()
