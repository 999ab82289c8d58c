"""Demo accounts. Passwords are hashed when the seed is loaded."""

MOCK_USERS = [
    {
        "id": "user-1",
        "email": "admin@example.com",
        "password": "admin123",
        "role": "admin",
        "full_name": "Admin User",
        "username": "admin",
        "display_name": "Admin User",
        "bio": "System administrator",
        "avatar_url": "https://api.dicebear.com/7.x/avataaars/svg?seed=admin",
        "created_at": "2024-01-01T00:00:00Z",
    },
    {
        "id": "user-2",
        "email": "john@example.com",
        "password": "user123",
        "role": "user",
        "full_name": "John Doe",
        "username": "johndoe",
        "display_name": "John Doe",
        "bio": "Software engineer and tech enthusiast",
        "avatar_url": "https://api.dicebear.com/7.x/avataaars/svg?seed=john",
        "created_at": "2024-01-15T00:00:00Z",
    },
    {
        "id": "user-3",
        "email": "jane@example.com",
        "password": "user123",
        "role": "user",
        "full_name": "Jane Smith",
        "username": "janesmith",
        "display_name": "Jane Smith",
        "bio": "Frontend developer and designer",
        "avatar_url": "https://api.dicebear.com/7.x/avataaars/svg?seed=jane",
        "created_at": "2024-02-01T00:00:00Z",
    },
]
