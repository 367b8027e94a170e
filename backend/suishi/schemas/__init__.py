# backend/suishi/schemas/__init__.py
