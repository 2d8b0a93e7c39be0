"""
Periodic Google Shopping offer ingestion into grouped product records.
"""
