"""Teacher performance scoring engine.

Organized by feature modules (holidays, attendance, academics, surveys,
paper_returns, performance) with Protocol repositories, MySQL adapters and a
thin Flask controller layer on top of the services.
"""
