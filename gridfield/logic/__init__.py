"""logic — Field solvers.

Top-level modules
-----------------
providers   — neighbourhood and move-cost callables for square grids
potential   — Dijkstra maps with attraction/repulsion, flee and range maps
visibility  — recursive shadow-casting light map
"""
