from autotest.services.source_inspector import (
    detect_frameworks,
    extract_api_endpoints,
    extract_dependencies,
    fallback_project_analysis,
    file_type,
    inspect_file,
    is_source_file,
    language_from_filename,
    parse_uploaded_files,
    project_structure,
    summarize_files,
)

JAVA_SERVICE = """// File: src/main/java/com/shop/OrderService.java
package com.shop;

import org.springframework.stereotype.Service;
import java.util.List;

@Service
public class OrderService {
    public Order placeOrder(Cart cart) {
        return new Order(cart);
    }

    public List<Order> findOrders(String customer) {
        return repository.find(customer);
    }
}
"""

JAVA_CONTROLLER = """// File: src/main/java/com/shop/OrderController.java
import org.springframework.web.bind.annotation.RestController;

@RestController
public class OrderController {
    @GetMapping("/orders")
    public List<Order> list() { return service.all(); }

    @PostMapping(value = "/orders")
    public Order create(Order order) { return service.save(order); }
}
"""

EXPRESS_APP = """// File: server.js
const express = require('express');
const app = express();
app.get('/health', (req, res) => res.send('ok'));
router.post("/users", createUser);
"""

PYTHON_MODULE = """// File: app/users.py
from fastapi import APIRouter
import requests
from .models import User

class UserService:
    def create(self, email):
        pass

    def __repr__(self):
        return "UserService"
"""


def test_parse_uploaded_files():
    files = parse_uploaded_files("ignored preamble\n" + JAVA_SERVICE + PYTHON_MODULE)

    assert [f.name for f in files] == ["src/main/java/com/shop/OrderService.java", "app/users.py"]
    assert files[0].language == "java"
    assert files[0].testable_elements == ["OrderService", "placeOrder", "findOrders"]
    assert files[1].testable_elements == ["UserService", "create"]
    assert files[1].lines_of_code > 0


def test_language_from_filename():
    assert language_from_filename("a.tsx") == "typescript"
    assert language_from_filename("a.jsx") == "javascript"
    assert language_from_filename("README.md") == "unknown"
    assert language_from_filename("src/Main.KT") == "kotlin"
    assert file_type("App.tsx") == "React TSX"
    assert is_source_file("lib/core.go")
    assert not is_source_file("notes.txt")


def test_extract_dependencies_skips_jdk_and_relative_imports():
    files = parse_uploaded_files(JAVA_SERVICE + PYTHON_MODULE + EXPRESS_APP)
    assert extract_dependencies(files) == ["org", "fastapi", "requests", "express"]


def test_detect_frameworks():
    files = parse_uploaded_files(JAVA_SERVICE + JAVA_CONTROLLER + PYTHON_MODULE + EXPRESS_APP)
    frameworks = detect_frameworks(files)
    assert "Spring Boot" in frameworks
    assert "Spring MVC" in frameworks
    assert "FastAPI" in frameworks
    assert "Express.js" in frameworks


def test_extract_api_endpoints():
    files = parse_uploaded_files(JAVA_CONTROLLER + EXPRESS_APP)
    endpoints = [(e["method"], e["path"]) for e in extract_api_endpoints(files)]
    assert endpoints == [("GET", "/orders"), ("POST", "/orders"), ("GET", "/health"), ("POST", "/users")]


def test_summarize_files_limits_elements():
    files = parse_uploaded_files(JAVA_SERVICE)
    summary = summarize_files(files)
    assert summary[0]["name"].endswith("OrderService.java")
    assert summary[0]["type"] == "java"
    assert summary[0]["elements"] == ["OrderService", "placeOrder", "findOrders"]


def test_fallback_project_analysis():
    files = parse_uploaded_files(JAVA_SERVICE + JAVA_CONTROLLER)
    analysis = fallback_project_analysis(files)

    assert analysis["structure"]["projectType"] == "maven"
    assert analysis["structure"]["mainLanguage"] == "java"
    assert analysis["complexity"] == "low"
    first = analysis["testableClasses"][0]
    assert first["className"] == "OrderService"
    assert first["package"] == "src.main.java.com.shop.OrderService"
    assert first["methods"] == ["placeOrder", "findOrders"]


def test_inspect_file_complexity_and_elements():
    big = inspect_file("Report.java", "public class Report {\n" + "    int x;\n" * 250 + "}\n")
    assert big.complexity == "high"
    assert big.testable_elements == ["Report"]

    other = inspect_file("main.go", "package main\n" * 60)
    assert other.complexity == "medium"
    assert other.language == "go"
    assert other.testable_elements == []


def test_project_structure_recommendations():
    files = [inspect_file(f"pkg{i % 3}/m{i}.{ext}", "x = 1\n" * 100) for i, ext in enumerate(["py", "go", "rb"] * 18)]
    structure = project_structure(files)

    assert structure["totalFiles"] == 54
    assert structure["languages"] == {"python": 18, "go": 18, "ruby": 18}
    assert structure["directories"] == {"pkg0": 18, "pkg1": 18, "pkg2": 18}
    assert structure["complexity"] == "high"
    assert structure["recommendations"] == [
        "Consider generating tests in batches for better performance",
        "Multi-language project detected - ensure consistent testing frameworks",
        "High complexity project - focus on critical path testing first",
    ]
