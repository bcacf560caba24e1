"""DevSocial - social network backend for developers.

Users register and log in, publish posts, like and comment on each
other's posts, and maintain a developer profile with work experience.
"""

__version__ = "0.1.0"
