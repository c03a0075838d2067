from coinpulse.main import main

main()
