"""Domain packages - one per entity: schemas, repository, service, router"""
