"""
services/ - Business Logic Layer
================================
Services sit on top of the repositories and hold the operations that
combine or adjust domain objects before persisting them.
"""
