# Services package init
"""
Bloglist Backend — Services Layer
==================================

Service Inventory:
    - BlogService: list / create / like / delete blogs
    - UserService: register and list users
    - AuthService: login and bearer-token resolution (AuthContext)
    - security: bcrypt digests and JWT signing

Services are stateless singletons; the database session is passed per call.
"""
