"""Application layer - bootstrap orchestration services and their ports.

Depends only on the domain layer and on the Protocols declared in
app/ports. Concrete collaborators are wired in by langchat.boot.
"""
