"""TasteGraph Concierge: taste-graph travel itineraries and retail taste-gap analysis."""
