"""
Customers module.

- Data access over the `customers` table (list newest-first, insert, delete by id)
- A stateless JSON request handler mounted at /api/customers
- A client-side controller (state reducer + in-flight guards) driving the HTML form/list
"""
