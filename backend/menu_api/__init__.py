"""
Menu API: store menu management (categories, menu items, customizations).
"""
