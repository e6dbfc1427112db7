"""Markdown templates for the generated document set.

Placeholders:
    $name        project name as extracted from the prompt
    $name_lower  project name, lowercased
    $slug        project name, lowercased, whitespace runs replaced by "-"
    $prompt      verbatim prompt
    $prompt_lower  prompt, lowercased

Templates carry no time-dependent values, so rendering is deterministic.
"""

from string import Template

FOOTER = "---\n*Generated by Circuit Flow*\n"

PRD = Template(
    """# Product Requirements Document
## $name

### 🎯 Product Vision
$prompt

### ❓ Problem Statement
Users need a solution that addresses: $prompt_lower

### 🎯 Goals
- Create an intuitive user experience
- Implement core functionality for $name_lower
- Deliver a production-ready solution
- Ensure scalability and maintainability

### 🚫 Non-Goals
- Complex enterprise features (v2)
- Multi-tenant architecture (v2)
- Advanced analytics (v2)

### 👥 Target Users
- Primary users who need $name_lower
- Teams looking for productivity improvements
- Organizations seeking modern solutions

### 🧩 Core Features
1. User Authentication & Authorization
2. Dashboard with key metrics
3. CRUD operations for main entities
4. Search and filtering capabilities
5. Responsive design for mobile/desktop

### ⚙️ Non-Functional Requirements
- Page load time under 2 seconds
- 99.9% uptime SLA
- WCAG 2.1 AA accessibility compliance
- Support for 10,000+ concurrent users

"""
    + FOOTER
)

TRD = Template(
    """# Technical Requirements Document
## $name

### 🧭 System Context
This document outlines the technical specifications for: $prompt

### 🔌 Technology Stack
- **Frontend:** React 18+ with TypeScript
- **Backend:** Node.js with Express
- **Database:** PostgreSQL
- **Caching:** Redis
- **Auth:** JWT with refresh tokens

### 🧱 API Contracts

#### Authentication
```
POST /api/auth/login
POST /api/auth/register
POST /api/auth/logout
GET /api/auth/me
```

#### Core Resources
```
GET /api/resources
POST /api/resources
GET /api/resources/:id
PUT /api/resources/:id
DELETE /api/resources/:id
```

### 🗃 Data Model
```sql
CREATE TABLE users (
    id UUID PRIMARY KEY,
    email VARCHAR(255) UNIQUE NOT NULL,
    password_hash VARCHAR(255) NOT NULL,
    created_at TIMESTAMP DEFAULT NOW()
);

CREATE TABLE resources (
    id UUID PRIMARY KEY,
    user_id UUID REFERENCES users(id),
    title VARCHAR(255) NOT NULL,
    data JSONB,
    created_at TIMESTAMP DEFAULT NOW()
);
```

### 🔐 Security Requirements
- Password hashing with bcrypt (12 rounds)
- HTTPS only in production
- Rate limiting: 100 req/min per IP
- SQL injection prevention via parameterized queries
- XSS prevention via content sanitization

"""
    + FOOTER
)

ARCHITECTURE = Template(
    """# Architecture Document
## $name

### 🧱 System Overview
$prompt

### 🏗 Architecture Style
Modern microservices-ready monolith with clear module boundaries.

```
┌─────────────────────────────────────────────┐
│                  Frontend                    │
│              (React + Vite)                  │
└─────────────────────┬───────────────────────┘
                      │ HTTPS
┌─────────────────────▼───────────────────────┐
│                API Gateway                   │
│             (Express + Node.js)              │
├─────────────────────────────────────────────┤
│  Auth    │  Resources  │  Analytics  │ ...  │
└──────────┴──────┬──────┴─────────────┴──────┘
                  │
┌─────────────────▼───────────────────────────┐
│              Data Layer                      │
│     PostgreSQL  │  Redis  │  S3             │
└─────────────────────────────────────────────┘
```

### 🎨 Frontend Architecture
- **Framework:** React with functional components
- **State:** Zustand for global state
- **Routing:** React Router v6
- **Styling:** Tailwind CSS
- **Build:** Vite

### 🧠 Backend Architecture
- **Runtime:** Node.js 20 LTS
- **Framework:** Express.js
- **ORM:** Prisma
- **Validation:** Zod
- **Testing:** Vitest

"""
    + FOOTER
)

API_SPEC = Template(
    """# API Specification
## $name

### Base URL
`https://api.yourproject.com/v1`

### Authentication
All endpoints require Bearer token authentication:
```
Authorization: Bearer <token>
```

### Endpoints

#### POST /auth/login
Authenticate user and receive tokens.

**Request:**
```json
{
  "email": "user@example.com",
  "password": "securepassword"
}
```

**Response:**
```json
{
  "accessToken": "eyJhbG...",
  "refreshToken": "dGhpcy...",
  "user": {
    "id": "uuid",
    "email": "user@example.com"
  }
}
```

#### GET /resources
List all resources for authenticated user.

**Query Parameters:**
- `page` (number): Page number (default: 1)
- `limit` (number): Items per page (default: 20)
- `search` (string): Search query

**Response:**
```json
{
  "data": [...],
  "pagination": {
    "page": 1,
    "limit": 20,
    "total": 100
  }
}
```

### Error Responses
```json
{
  "error": {
    "code": "VALIDATION_ERROR",
    "message": "Invalid input",
    "details": [...]
  }
}
```

"""
    + FOOTER
)

DEPLOYMENT = Template(
    """# Deployment Guide
## $name

### 🚀 Prerequisites
- Node.js 20+
- PostgreSQL 15+
- Redis 7+
- Docker (optional)

### 📦 Local Development

```bash
# Clone repository
git clone https://github.com/yourorg/$slug.git

# Install dependencies
npm install

# Set up environment
cp .env.example .env

# Run migrations
npm run db:migrate

# Start development server
npm run dev
```

### 🐳 Docker Deployment

```bash
# Build image
docker build -t $slug .

# Run container
docker run -p 3000:3000 --env-file .env $slug
```

### ☁️ Cloud Deployment

#### Vercel (Frontend)
1. Connect GitHub repository
2. Configure build settings
3. Add environment variables
4. Deploy

#### Railway (Backend)
1. Create new project
2. Add PostgreSQL database
3. Set environment variables
4. Deploy from GitHub

### 🔧 Environment Variables

| Variable | Description | Required |
|----------|-------------|----------|
| DATABASE_URL | PostgreSQL connection string | Yes |
| JWT_SECRET | Secret for JWT signing | Yes |
| REDIS_URL | Redis connection string | Yes |
| NODE_ENV | Environment (development/production) | Yes |

"""
    + FOOTER
)
