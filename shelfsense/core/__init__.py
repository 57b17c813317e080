"""
Decision engine: classifier, autocomplete ranker, service composition and configuration.
"""
