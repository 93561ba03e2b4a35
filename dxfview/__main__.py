from dxfview.qt.app import main

main()
