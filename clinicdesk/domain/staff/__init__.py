"""Staff domain - team members, hourly rates and specialties"""
