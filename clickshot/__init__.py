"""Click accuracy game backend: run validation, scoring and leaderboards."""
