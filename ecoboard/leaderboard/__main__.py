from ecoboard.leaderboard import main

main()
