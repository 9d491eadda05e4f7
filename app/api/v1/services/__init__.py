"""
Service layer: business rules for users, registration, products and chat.
"""
