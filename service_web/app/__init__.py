"""
Creator web service application package.
"""
