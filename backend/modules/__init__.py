"""
Feature modules for the DevCamper API.

auth and query are the core: session tokens, credentials and the list
query pipeline. bootcamps, courses, reviews and users are resource
modules built on top of them, each with its own models, repository,
service, routes and exceptions.
"""
