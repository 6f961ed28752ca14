"""
Trip Planner - personal itinerary, task board, budget and stays API.
"""
