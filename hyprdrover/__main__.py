from hyprdrover.cli_click import main

main()
