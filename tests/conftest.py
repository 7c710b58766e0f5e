"""Shared test fixtures."""

import pytest

CLIENT_GO = '''\
// Copyright 2024 Acme. All rights reserved.

// Package widget builds and sizes widgets.
//
// Overview
//
// Widgets are small. Use New to make one:
//
//	w := widget.New("a")
//	w.Resize(3)
package widget

import "fmt"

// Kind classifies widgets.
type Kind int

// Known kinds.
const (
	Small Kind = iota
	Large
)

// MaxSize is the largest size a widget can take.
const MaxSize = 10

// ErrTooBig is returned by Resize.
var ErrTooBig = fmt.Errorf("widget: too big")

// Widget is a sized thing.
type Widget struct {
	Name string
	size int
}

// New returns a widget named name.
func New(name string) *Widget {
	return &Widget{Name: name}
}

// Resize changes the size of w.
func (w *Widget) Resize(n int) error {
	if n > MaxSize {
		return ErrTooBig
	}
	w.size = n
	return nil
}

func (w *Widget) grow() {}

// Describe prints a widget.
func Describe(w *Widget) string {
	return fmt.Sprintf("%s:%d", w.Name, w.size)
}

func helper() {}
'''

EXAMPLE_TEST_GO = '''\
package widget_test

import (
	"fmt"

	"example.com/acme/widget"
)

func Example() {
	fmt.Println("package example")
}

func ExampleNew() {
	w := widget.New("a")
	fmt.Println(w.Name)
	// Output: a
}

func ExampleNew_second() {
	w := widget.New("b")
	fmt.Println(w.Name)
}

func ExampleWidget_Resize() {
	w := widget.New("c")
	_ = w.Resize(2)
}

func TestNotAnExample(t *testing.T) {}
'''


@pytest.fixture
def go_package(tmp_path):
    """A Go module with one documented package at example.com/acme/widget."""
    root = tmp_path / "mod"
    pkg = root / "widget"
    pkg.mkdir(parents=True)
    (root / "go.mod").write_text("module example.com/acme\n\ngo 1.21\n")
    (pkg / "widget.go").write_text(CLIENT_GO)
    (pkg / "example_test.go").write_text(EXAMPLE_TEST_GO)
    (pkg / "README.md").write_text("old readme\n")
    return pkg
