"""
Municipality lookup for the share of foreign-language children in
early-childhood education (varhaiskasvatus), compared to the whole country.
"""
