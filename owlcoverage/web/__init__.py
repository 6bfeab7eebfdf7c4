"""Web dashboard for OWL Coverage."""
