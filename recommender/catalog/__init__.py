"""
Product catalog.

Responsibilities:
- Define the Product schema shared by the API and the matching engine.
- Load the seed catalog from JSON and hold the current in-memory catalog.
- Create, read, update and delete products as new catalog states.
- Derive the selectable preference/feature options for the form.
"""
