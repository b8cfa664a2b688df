# Routes package init
"""
PicTweet Backend — API Routes Package
=======================================

What:  HTTP route handlers; thin wrappers that delegate to the services layer.

Route Inventory (mounted under /api/v1 by `api_router`):
    - auth.py:          /auth/register, /auth/login, /auth/me
    - tweets.py:        /tweets, /tweets/search, /tweets/{id}
    - users.py:         /users/{id}/follow|unfollow|profile|followers|following|likes
    - interactions.py:  /tweets/{id}/like|unlike|comments

Mounted at the root:
    - media.py:   GET /media/{path}   (stored images)
    - health.py:  GET /health
"""

from fastapi import APIRouter

from pictweet.routes import auth, interactions, tweets, users

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(tweets.router)
api_router.include_router(users.router)
api_router.include_router(interactions.router)
