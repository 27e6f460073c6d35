"""
WeekGrid: weekly class timetable with conflict detection.
"""
