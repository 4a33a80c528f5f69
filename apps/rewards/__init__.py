"""
The 'rewards' app turns a handle's leaderboard rows into a speculative token
allocation for one project, priced at a simulated FDV.
"""
