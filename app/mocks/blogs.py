MOCK_BLOGS = [
    {
        "id": "blog-1",
        "slug": "getting-started-with-react",
        "title": "Getting Started with React in 2024",
        "excerpt": "A comprehensive guide to starting your React journey with modern best practices and tools.",
        "content": "# Getting Started with React in 2024\n\nReact remains one of the most popular frontend libraries.\n\n## Setting Up\n\nThe easiest way to start is with Vite.",
        "cover_image": "https://images.unsplash.com/photo-1633356122544-f134324a6cee?w=800",
        "author_id": "user-2",
        "tags": ["React", "JavaScript", "Web Development", "Tutorial"],
        "published": True,
        "read_time": 5,
        "created_at": "2024-01-10T00:00:00Z",
    },
    {
        "id": "blog-2",
        "slug": "typescript-best-practices",
        "title": "TypeScript Best Practices for Large Projects",
        "excerpt": "Learn how to leverage TypeScript effectively in large-scale applications.",
        "content": "# TypeScript Best Practices\n\n## Use strict mode\n\nAlways enable strict mode in tsconfig.json.",
        "cover_image": "https://images.unsplash.com/photo-1516116216624-53e697fedbea?w=800",
        "author_id": "user-2",
        "tags": ["TypeScript", "Best Practices", "Programming"],
        "published": True,
        "read_time": 7,
        "created_at": "2024-02-05T00:00:00Z",
    },
    {
        "id": "blog-3",
        "slug": "building-responsive-layouts",
        "title": "Building Responsive Layouts with Tailwind CSS",
        "excerpt": "Master responsive design patterns using Tailwind CSS utility classes.",
        "content": "# Responsive Layouts\n\nTailwind is mobile first: unprefixed utilities apply to every screen size.",
        "cover_image": "https://images.unsplash.com/photo-1507238691740-187a5b1d37b8?w=800",
        "author_id": "user-3",
        "tags": ["CSS", "Tailwind", "Responsive Design", "Frontend"],
        "published": True,
        "read_time": 6,
        "created_at": "2024-03-01T00:00:00Z",
    },
    {
        "id": "blog-4",
        "slug": "nodejs-microservices",
        "title": "Building Microservices with Node.js",
        "excerpt": "A practical guide to designing and implementing microservices architecture.",
        "content": "# Microservices with Node.js\n\n## Best Practices\n\n1. Keep services focused\n2. Implement proper monitoring\n3. Use API gateways\n4. Handle failures gracefully",
        "cover_image": "https://images.unsplash.com/photo-1558494949-ef010cbdcc31?w=800",
        "author_id": "user-2",
        "tags": ["Node.js", "Microservices", "Architecture", "Backend"],
        "published": True,
        "read_time": 8,
        "created_at": "2024-03-20T00:00:00Z",
    },
]
