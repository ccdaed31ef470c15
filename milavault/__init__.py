"""MilaVault: personal contact vault with locally persisted drafts."""
