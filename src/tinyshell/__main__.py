from tinyshell.shell import main

main()
