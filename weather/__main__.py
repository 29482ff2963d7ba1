from weather.server import main

main()
