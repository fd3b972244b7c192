# Services package init
"""
Meigen Backend — Services Layer
================================

What:  Business rules between the routes (HTTP) and the database.
How:   Each service is a stateless class with a module-level singleton;
       every method takes the request's AsyncSession as its first argument.

Service Inventory:
    - SessionService:      admin login, token validation, logout
    - DailyQuoteService:   daily featured-set generation and reads
    - CategoryService, SubcategoryService, AuthorService:
                           catalogue CRUD with soft delete
    - QuoteService:        quote reads, search and admin writes

Services never build HTTP responses. They return ORM rows or schema
objects, return None for "not found", and raise MeigenError subclasses
for everything else.
"""
