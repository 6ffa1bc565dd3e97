"""
Trajectory shape tuner: closed-form and stochastic trajectory models, batch
statistics and the session state that ties them together.
"""
