"""Terminal client for the todo API"""
