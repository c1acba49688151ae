"""NearH hospital network backend: cached authorization profiles and master data."""
