from recallsh.shell import main

main()
