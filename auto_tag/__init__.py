"""Create release tags for Cargo, npm and Python packages that opt in."""
