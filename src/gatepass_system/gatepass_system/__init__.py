"""Gate Pass System package.

Organized by feature modules (requests, passes, logs, users, admin) with a
thin Flask controller layer over service/repository layers that share one
injected document store.
"""
