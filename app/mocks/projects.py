MOCK_PROJECTS = [
    {
        "id": "project-1",
        "slug": "ecommerce-platform",
        "title": "E-Commerce Platform",
        "description": "A full-stack e-commerce platform with React, Node.js, and PostgreSQL",
        "long_description": "A comprehensive e-commerce solution featuring user authentication, product management, shopping cart, payment integration, and an admin dashboard.",
        "image": "https://images.unsplash.com/photo-1557821552-17105176677c?w=800",
        "technologies": ["React", "Node.js", "PostgreSQL", "Stripe", "Redux", "Express"],
        "category": "Full-Stack",
        "github_url": "https://github.com/example/ecommerce",
        "live_url": "https://example-ecommerce.com",
        "featured": True,
        "created_at": "2024-01-15T00:00:00Z",
    },
    {
        "id": "project-2",
        "slug": "task-management-app",
        "title": "Task Management App",
        "description": "A collaborative task management application with real-time updates",
        "long_description": "Team collaboration tool with drag-and-drop task boards, real-time synchronization, team chat, and project analytics.",
        "image": "https://images.unsplash.com/photo-1454165804606-c3d57bc86b40?w=800",
        "technologies": ["React", "TypeScript", "Firebase", "Material-UI", "React DnD"],
        "category": "Frontend",
        "github_url": "https://github.com/example/task-manager",
        "live_url": "https://example-tasks.com",
        "featured": True,
        "created_at": "2024-02-01T00:00:00Z",
    },
    {
        "id": "project-3",
        "slug": "weather-dashboard",
        "title": "Weather Dashboard",
        "description": "Real-time weather dashboard with interactive maps and forecasts",
        "long_description": "Current conditions, 7-day forecasts, interactive weather maps, and location-based alerts backed by multiple weather APIs.",
        "image": "https://images.unsplash.com/photo-1592210454359-9043f067919b?w=800",
        "technologies": ["React", "TypeScript", "OpenWeather API", "Recharts", "Tailwind CSS"],
        "category": "Frontend",
        "github_url": "https://github.com/example/weather",
        "featured": False,
        "created_at": "2024-02-15T00:00:00Z",
    },
    {
        "id": "project-4",
        "slug": "social-media-api",
        "title": "Social Media API",
        "description": "RESTful API for a social media platform with authentication and real-time features",
        "long_description": "REST API with JWT authentication, user profiles, posts, comments, likes, a follow system, and WebSocket notifications.",
        "image": "https://images.unsplash.com/photo-1611162617474-5b21e879e113?w=800",
        "technologies": ["Node.js", "Express", "MongoDB", "JWT", "Socket.io", "Redis"],
        "category": "Backend",
        "github_url": "https://github.com/example/social-api",
        "featured": True,
        "created_at": "2024-03-01T00:00:00Z",
    },
    {
        "id": "project-5",
        "slug": "portfolio-generator",
        "title": "Portfolio Generator",
        "description": "Automated portfolio website generator with customizable themes",
        "long_description": "Generates portfolio websites from user input with multiple themes, drag-and-drop customization, SEO optimization, and one-click deployment.",
        "image": "https://images.unsplash.com/photo-1467232004584-a241de8bcf5d?w=800",
        "technologies": ["Next.js", "TypeScript", "Tailwind CSS", "Vercel", "Prisma"],
        "category": "Full-Stack",
        "github_url": "https://github.com/example/portfolio-gen",
        "live_url": "https://portfolio-gen.com",
        "featured": False,
        "created_at": "2024-03-15T00:00:00Z",
    },
    {
        "id": "project-6",
        "slug": "ai-chatbot",
        "title": "AI Chatbot Platform",
        "description": "Intelligent chatbot platform powered by machine learning",
        "long_description": "Chatbot platform with natural language processing, context awareness, multi-language support, and messaging integrations.",
        "image": "https://images.unsplash.com/photo-1531746790731-6c087fecd65a?w=800",
        "technologies": ["Python", "TensorFlow", "React", "FastAPI", "PostgreSQL", "Docker"],
        "category": "Full-Stack",
        "github_url": "https://github.com/example/ai-chatbot",
        "featured": False,
        "created_at": "2024-04-01T00:00:00Z",
    },
]
