"""dblaunch: pick an environment and database, then hand off to pgcli or psql."""
