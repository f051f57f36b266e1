from spectrascope.cli import main

main()
