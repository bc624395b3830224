from .insights import agricultural_insights, daily_forecast, forecast_recommendations

__all__ = ["agricultural_insights", "daily_forecast", "forecast_recommendations"]
