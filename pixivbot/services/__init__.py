"""
Relay services - Business logic layer.

Contains the image pipeline used to turn pixiv image URLs into
uploads that satisfy the chat channel limits.
"""
