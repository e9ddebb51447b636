"""
Aggregation demos and the Elasticsearch primitives they run on.
"""
