"""
Restaurant API - Routes Package
================================

Route Inventory:
    - root.py:         GET /                    (HTML greeting)
    - health.py:       GET /health              (store connectivity check)
    - restaurants.py:  GET /restaurants, GET|PUT|DELETE /restaurant/{id},
                       POST /restaurant

Routes stay THIN: validate input, call one service method, return.
"""
