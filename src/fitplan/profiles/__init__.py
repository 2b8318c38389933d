"""Energy expenditure and body composition estimates."""
