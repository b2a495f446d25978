"""Services - data sources behind the routes."""
