"""
The MODEL layer contains pure data structures and numeric logic.
It has NO knowledge of any chart or 3D front end.
It deals with parameters, samples, randomness and batch statistics.
"""
