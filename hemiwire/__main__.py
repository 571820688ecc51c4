from hemiwire.viewer import main

main()
