"""
Pure computation services for cycle prediction, patterns and insights.
"""
