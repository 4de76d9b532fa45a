"""nestgen -- scaffold NestJS JWT authentication and CRUD modules into a project."""

__version__ = "0.1.0"
