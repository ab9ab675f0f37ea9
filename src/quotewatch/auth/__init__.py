"""Authentication and session authorization.

credentials  user records and password verification
tokens       signed session tokens
transport    cookie / Bearer header handling
guards       FastAPI dependencies forming the authorization chain
rate_limit   per-address throttling of auth endpoints
"""
