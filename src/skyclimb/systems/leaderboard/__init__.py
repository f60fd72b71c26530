"""Remote leaderboard client."""
