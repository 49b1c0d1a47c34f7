from stamper.cli import main

main()
