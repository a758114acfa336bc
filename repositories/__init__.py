"""
repositories/ - Data Access Layer
==================================
SQL for expenses and their owners. Rows come back as domain objects,
always scoped to one owner.
"""
