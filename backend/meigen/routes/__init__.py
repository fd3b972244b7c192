# Routes package init
"""
Meigen Backend — API Routes Package
====================================

Route Inventory:
    - auth.py:           POST/DELETE /api/login
    - categories.py:     /api/categories[/{id}[/subcategories|/authors]]
    - subcategories.py:  /api/subcategories[/{id}]
    - authors.py:        /api/authors[/{id}]
    - quotes.py:         /api/quotes[/{id}]
    - search.py:         GET /api/search
    - daily_quotes.py:   GET /api/daily-quotes, GET /api/cron/daily-quotes
    - health.py:         GET /health
    - deps.py:           shared dependencies (admin gate, cron secret)

Routes stay thin: parse the request, call one service, wrap the result in
SuccessResponse. A None from a service becomes NotFoundError here.
"""
