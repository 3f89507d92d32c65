"""TourHub favorites service: GraphQL API and Python client."""
