"""
REST API for REPTrack.
"""
