class TableNotConfiguredError(Exception):
    """Custom error that is raised when an opened table has no table configuration"""

    pass


class ViewNameCollisionError(Exception):
    """
    Exception raised when two normalized columns resolve to the same view name
    within one schema.
    """

    def __init__(self, schema, view_name, table, column):
        self.schema = schema
        self.view_name = view_name
        self.table = table
        self.column = column
        super().__init__(
            f"View '{schema}.{view_name}' generated for column {table}.{column} "
            f"already exists; adjust the view name pattern"
        )
