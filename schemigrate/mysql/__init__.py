"""MySQL blueprints, drivers, schema operations, seeding and migration tracking."""