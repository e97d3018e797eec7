"""Infrastructure - concrete implementations of app/ports.

Only langchat.boot imports from here.
"""
