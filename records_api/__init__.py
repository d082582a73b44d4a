"""Sample Records API: generic CRUD over sample records plus a contact-form mailer."""

__version__ = "0.1.0"
