"""
API routers, one module per resource

Handlers that touch the database are plain `def`; FastAPI runs them in its
threadpool while the Session blocks.
"""
