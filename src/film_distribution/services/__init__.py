"""
Domain services and external collaborators (payments, email, moderation)
"""
