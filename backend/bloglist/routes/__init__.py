# Routes package init
"""
Bloglist Backend — API Routes Package
======================================

Route Inventory:
    - blogs.py:   GET/POST /api/blogs, PUT/DELETE /api/blogs/{id}
    - users.py:   GET/POST /api/users
    - login.py:   POST /api/login
    - health.py:  GET /health

Routes are thin: extract input, call a service, return its result.
"""
