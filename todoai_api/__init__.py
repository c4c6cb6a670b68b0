"""
PURPOSE: FastAPI REST API for TodoAI - CRUD over the todos table plus the natural-language /ai endpoint
SRP and DRY check: Pass - Single responsibility of the API layer, intent resolution lives in the todoai package
"""
