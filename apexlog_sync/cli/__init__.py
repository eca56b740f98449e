"""Command-line configuration and output"""
