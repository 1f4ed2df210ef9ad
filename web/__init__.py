"""
Web surface for the Keylight intake form.
"""
