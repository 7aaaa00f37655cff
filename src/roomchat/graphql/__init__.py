"""GraphQL schema for Roomchat."""
