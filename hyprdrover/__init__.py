"""hyprdrover – save and restore Hyprland window sessions."""
