"""
Boundary with the Jira API: the issue payload model, the key channel used
to stream search results and the client protocol.
"""
