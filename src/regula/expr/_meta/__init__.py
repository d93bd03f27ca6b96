from regula import setupModule

config, logger = setupModule(__name__)
