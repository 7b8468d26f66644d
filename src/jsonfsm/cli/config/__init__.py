"""Machine definition commands: validate and show."""
