"""
Collaborators around the game engine: tick schedulers and renderers.

The pygame window lives in services.pygame_frontend and is only imported
when a window is actually opened.
"""
