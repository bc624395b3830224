"""Weather domain: conditions, forecast days and agricultural rules."""
