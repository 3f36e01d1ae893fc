"""Domain layer for wedplan application.

Services are imported from their own modules (``wedplan.domain.cost`` and
so on); the database layer imports ``wedplan.domain.entities`` and must be
able to do so without pulling the services in.
"""
