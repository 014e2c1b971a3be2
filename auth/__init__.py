"""
auth — User authentication module.

Provides:
  • Signed bearer token issuing & verification (JWT, HS256)
  • Password hashing (bcrypt, work factor 10)
  • Credential store with register / login
  • ``get_current_email`` FastAPI guard dependency
"""
