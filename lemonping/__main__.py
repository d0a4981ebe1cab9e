from lemonping.serve import main

main()
