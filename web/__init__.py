"""
HTTP layer for the todo API.

web.main.create_app() builds the FastAPI app and mounts:
- web.auth_routes.router  (/register, /login, /me)
- web.todo_routes.router  (/todos)
"""
