"""GraphQL gateway building blocks: validation, templates, request contexts and resolver expressions."""

__version__ = "0.1.0"