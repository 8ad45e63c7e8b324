from clipread.web import main

main()
